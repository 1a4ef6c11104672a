"""Command line interface for dirstat"""
