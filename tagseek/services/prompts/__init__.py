"""Prompt templates for the TagSeek agents."""
