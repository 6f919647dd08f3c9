"""Exit Node Picker - Terminal UI for choosing a Tailscale exit node

Lists the exit nodes known to the local tailscale daemon, lets the user
pick one by country, city or full server record and applies the choice.
"""

__version__ = "1.0.0"
__author__ = "Exit Node Picker Team"

__all__ = ["__author__", "__version__"]
