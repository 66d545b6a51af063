"""LCA Insight: life cycle inventory analysis with AI impact estimates."""
