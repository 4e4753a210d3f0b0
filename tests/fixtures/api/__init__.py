"""DTO package scanned by discovery tests."""
