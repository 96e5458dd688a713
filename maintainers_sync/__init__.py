"""
Maintainers sync.

Keeps a YAML roster of maintainers in step with the CODEOWNERS files of
every repository in a GitHub organization.
"""

__version__ = "0.1.0"
