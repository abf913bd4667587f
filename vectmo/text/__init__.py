"""Fixed alphabet indexing and character-histogram embeddings."""
