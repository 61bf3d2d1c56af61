"""Veo video generation proxy service."""
