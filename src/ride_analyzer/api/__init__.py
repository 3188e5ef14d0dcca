"""HTTP API for the Ride Analyzer."""
