"""Language server for mathlex expression documents."""
