"""Job loading, dataset generation and the command-line runner."""
