"""Shrink Ray: shrink a 7-letter word down to 3 letters, one stage a day."""
