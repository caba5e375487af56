"""Complete a word from a sequence of choices"""
