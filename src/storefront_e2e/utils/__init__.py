# Utility modules: price and product parsing, keywords, resilience
