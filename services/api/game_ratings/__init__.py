"""Game Ratings API."""
