"""Pydantic request/response models shared by the routes."""
