"""Architects, contractors and customers."""
