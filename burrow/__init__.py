"""Burrow: procedural rooms-and-corridors dungeon generation."""
