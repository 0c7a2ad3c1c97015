"""Tests for nlucore."""
