"""Test suite for the truck parts chat backend."""
