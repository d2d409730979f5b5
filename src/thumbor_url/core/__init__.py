"""Value objects, configuration and errors shared by the URL builder."""
