"""CLI module for deckbridge."""
