"""Identifier and value helpers"""
