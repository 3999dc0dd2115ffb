#!/usr/bin/env python3
# Sample twokenize call.

from twoken import twokenize

tok = twokenize.Tokenizer()  # Initialize tokenizer (patterns are compiled once, at import)
print(tok.tokenize("Dont worry :) it's only 12:53"))
print(tok.tokenize_string("Sold,for $9,999.99 on ebay.com."))
