"""Services Layer — persistence operations invoked by routes and the importer."""
