"""
Geode Installer for Linux

Installs the Geode mod loader into Geometry Dash running under Steam/Proton
or a plain Wine prefix.
"""

__version__ = "0.1.0"
