"""Rounds API: drinking-session comments, mentions and realtime notifications."""
