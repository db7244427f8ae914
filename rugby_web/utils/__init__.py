"""Template helpers"""
