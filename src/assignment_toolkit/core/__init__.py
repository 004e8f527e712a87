"""Core data models shared by the layout engine and the page controller."""
