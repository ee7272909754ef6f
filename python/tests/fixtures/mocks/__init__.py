"""Collaborator fakes."""
