"""Distributions, values, bounded inputs, the algorithm registry and the weighted arithmetic mean."""