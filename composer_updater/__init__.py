"""Keeps composer.json of WordPress repositories in sync with their plugins."""
