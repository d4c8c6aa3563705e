"""Driver-side building blocks shared by the optimizers."""
