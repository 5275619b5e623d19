"""
Lama Comparator
===============

Serverless endpoint behind TheLamaNest product comparator:
- index: public listing of the Lama catalog
- metrics: both full Lama records plus an optional AI comparison
- narrative: persuasive comparison written from the long-form blog reviews
"""

__version__ = "1.0.0"
