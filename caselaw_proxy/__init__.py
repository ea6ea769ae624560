"""Civil-rights opinion search proxy for the CourtListener API."""
