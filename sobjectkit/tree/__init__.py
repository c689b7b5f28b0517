"""Records, a record builder and a client for the composite SObject Tree API."""