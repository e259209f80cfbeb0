"""Tests for mt4client."""
