__version__ = '0.2.1'
__description__ = '''twoken: protected-span tokenizer for noisy social-media text (emoticons, URLs, abbreviations)'''
last_mod_date = 'October 17, 2026'
