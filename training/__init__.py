"""
Labeled utterances and accuracy check for the intent rule table.
"""
