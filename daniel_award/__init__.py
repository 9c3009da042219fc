"""
Daniel Award: page d'inscription (sponsoring / places) et paiement Stripe.
"""

__version__ = "1.0.0"
