"""Secret data synthesis and reconciliation"""
