"""Presentation layer (HTTP routes and admin CLI) for the tenancy context."""
