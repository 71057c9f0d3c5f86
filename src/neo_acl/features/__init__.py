"""Feature packages for neo-acl."""
