"""
Application Layer - Use cases over the word data providers.

- aggregation: concurrent multi-provider lookup into one WordBundle
- synthesis: AI summary of a bundle
- word_of_the_day: process-wide seed word
"""
