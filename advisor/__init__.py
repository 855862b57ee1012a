"""City weather advisory service with a fallback forecast backup."""
