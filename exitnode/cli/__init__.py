"""Command line interface for Exit Node Picker."""
