"""Cloud media asset migration and gallery configuration.

Converts attachments created by the legacy (v1) media integration into
structured asset identifiers, and assembles the product-gallery widget
configuration from flat plugin settings.
"""

__version__ = "0.1.0"
