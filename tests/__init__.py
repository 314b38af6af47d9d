"""Tests package for SERP Search Hub."""
