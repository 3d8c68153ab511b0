"""Headless lighthouse rounds driven by scripted operators."""
