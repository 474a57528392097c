"""Domain layer for current affairs rewriting and MCQ generation."""
