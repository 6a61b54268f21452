"""
Main entry point for the diaspora_api package.

Allows running the client as: python -m diaspora_api
"""

from diaspora_api.cli import main

if __name__ == "__main__":
    main()
