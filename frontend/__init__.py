"""
Job Tracker UI - Flask app serving the kanban board and its JSON API,
plus a terminal board client in frontend.board.
"""
