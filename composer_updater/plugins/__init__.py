"""Collaborator plugins for composer-updater."""
