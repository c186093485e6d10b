"""Public PR finder.

Lists open pull requests on a GitHub repository that were opened by people
outside a set of organizations:
- Members of every configured organization are excluded
- Bot accounts are excluded unless explicitly included
- Matching PRs can optionally be linked to a GitHub Projects (v2) board
"""

__version__ = "1.0.0"
