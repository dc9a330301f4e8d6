"""
Component check tests.

Unit tests for state and collaborators, the loader, the validator and the
load-and-validate cycle.
"""
