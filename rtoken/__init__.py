__version__ = '0.1.0'
last_mod_date = 'October 19, 2026'
__description__ = 'Rule-based multi-lingual word tokenizer with non-breaking prefix handling'
