"""
ANSI colour codes used by the CLI frontend.
"""

COLOR_RESET = "\033[0m"
COLOR_BOLD = "\033[1m"

COLOR_HEADER = "\033[1;33m"     # Bold yellow
COLOR_PROMPT = "\033[1;37m"     # Bold white
COLOR_STEAM = "\033[1;34m"      # Bold blue
COLOR_WINE = "\033[1;35m"       # Bold magenta
COLOR_INFO = "\033[0;36m"       # Cyan
COLOR_SUCCESS = "\033[1;32m"    # Bold green
COLOR_ERROR = "\033[1;31m"      # Bold red
