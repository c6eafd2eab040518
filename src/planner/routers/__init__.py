"""HTTP routers: usernames, projects, todos and the per-user views."""
