"""
PHP
===

Execution of .php files through an external PHP interpreter.
"""
