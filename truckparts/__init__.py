"""
Truck Parts Chat - web tier for the truck-parts chatbot
"""

__version__ = "1.0.0"
