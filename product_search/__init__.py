"""Image-driven product search: keyword resolution, relevance scoring, result assembly."""
