"""Services package: GitHub client, event broadcasting, and documentation agent logic."""
