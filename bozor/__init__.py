"""
Bozor search core: multi-script listing search, ranking and recommendations
for an Uzbek marketplace.
"""

__version__ = "1.0.0"
