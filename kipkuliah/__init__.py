"""KIP Kuliah support site backend: student ID checks and a Q&A board."""
