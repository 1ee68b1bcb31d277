"""Simulation helpers for tests and scripts"""
