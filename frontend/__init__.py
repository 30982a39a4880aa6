# Ethan Doughty
# frontend/__init__.py
"""Frontend package: expression splitter, classifier and tokenizer."""
