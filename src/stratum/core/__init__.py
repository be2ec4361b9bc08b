"""Core building blocks of Stratum: the layer compiler, errors and config."""
