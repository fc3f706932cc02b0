"""Contract creation: address prediction and the deployer."""
