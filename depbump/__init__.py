"""Bump a dependency in package.json and open a pull request for it."""
