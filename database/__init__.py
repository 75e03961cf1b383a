"""Data access layer"""
