"""Shared test fixtures for kernel_selector."""
