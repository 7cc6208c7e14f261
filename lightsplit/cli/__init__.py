"""Unified command-line interface for lightsplit.

Usage:
    lightsplit parse <receipt.txt> [--ignore-phrase PHRASE]
    lightsplit reconcile <receipt.json|receipt.txt>
    lightsplit split <split.json>
    lightsplit serve [--host] [--port]
"""
