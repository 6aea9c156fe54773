"""
Core Package.

Contains the transpilation logic:
- JavaScript syntax layer (CST, parser, visitors)
- Framework classifier and structural extractor
- Tag engine and selector classifier
- Rewrite engine and page-object synthesizer
"""
