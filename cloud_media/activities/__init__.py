"""Operations.

- upgrade_asset: Convert a legacy (v1) attachment into stored asset metadata
- gallery_config: Assemble the product-gallery widget configuration
"""
