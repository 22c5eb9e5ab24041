"""Route groups for the Family Chores API.

- health: welcome message (`/`) and health probe (`/health`)
"""
