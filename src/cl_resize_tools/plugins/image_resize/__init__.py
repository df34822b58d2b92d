"""Image resize plugin: resize planning, Pillow codec, job task and routes."""
