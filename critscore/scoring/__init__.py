"""Scoring configuration loaded from YAML and the scorers built from it."""