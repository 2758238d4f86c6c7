"""Services: build, test and release orchestration over external tools."""
