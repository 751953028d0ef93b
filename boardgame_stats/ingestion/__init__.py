"""
Ingestion layer: reads the normalized collection export into validated models.

Submodules:
  data_loader  — load_collection(path) for ``data.json`` ({games, plays, generatedAt})
"""
