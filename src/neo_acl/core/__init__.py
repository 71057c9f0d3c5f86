"""Core building blocks shared by neo-acl features."""
