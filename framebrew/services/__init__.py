"""Services layer for Frame Brew.

Services implement business logic and orchestrate data operations.
Organized by feature:
- library: Video listing, detail, edit and delete
- projects / templates: Folder and prompt management
- uploads: Upload completion
- generation: Generation trigger and status progression
- scoring: Simulated quality scores
"""
