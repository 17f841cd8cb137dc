"""
inputguard Test Suite
=====================

Test Organization
-----------------
- tests/unit/validation/ : Validators, comparison predicates, messages, factory
- tests/unit/core/       : Configuration, logging and exception infrastructure

Testing Philosophy
------------------
- Unit tests only: no network, no database, files only through tmp_path
- Use pytest markers (unit, validation, core) to select subsets
- Follow AAA pattern: Arrange, Act, Assert
"""
