"""View models: task list (sort/layout), task editor, root coordinator."""
