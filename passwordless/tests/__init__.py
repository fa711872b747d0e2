"""Tests for :mod:`passwordless`."""
