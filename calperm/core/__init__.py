"""
Core building blocks shared by the UI and the mailbox service layer.
"""
