"""Entry point for running deckbridge as a module: python -m deckbridge"""

from deckbridge.cli.commands import app

if __name__ == "__main__":
    app()
