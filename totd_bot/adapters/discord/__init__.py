"""Discord adapters: REST client, command catalogue, message bodies."""
