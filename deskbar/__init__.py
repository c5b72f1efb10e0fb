# Deskbar Package
"""
Application menu core for the deskbar.

Modules:
  - apps: Desktop file parsing, directory scanning, categorization
  - search: Ranked app search and browse/search menu routing
  - services: Catalog snapshot service (Ignis/GObject)
  - utils: App launching and settings
"""

__version__ = "0.1.0.dev0"
