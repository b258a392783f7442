"""Solarized Bright theme constants for the Dash app."""

# Solarized Bright palette
BASE3 = "#FDF6E3"   # background
BASE2 = "#EEE8D5"   # sidebar bg
BASE1 = "#93A1A1"   # borders
BASE00 = "#657B83"  # body text
BASE01 = "#586E75"  # headers / emphasis

BLUE = "#268BD2"
GREEN = "#859900"
RED = "#DC322F"

FONT_STACK = '"JetBrains Mono", "Fira Code", "Cascadia Code", monospace'

SIDEBAR_WIDTH = "280px"
