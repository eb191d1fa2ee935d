"""Stories served to learners."""
