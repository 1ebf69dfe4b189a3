"""Utility helpers for TagSeek."""
