"""
railrename: rename classes, controllers and layouts in a Rails-style source
tree, keeping file names and textual references consistent.
"""

__version__ = "0.1.0"
