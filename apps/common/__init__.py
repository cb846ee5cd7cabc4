""" Helpers shared between apps """
