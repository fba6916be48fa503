"""Test package for stop-sequencer.

This package contains:
- Unit tests for each routing component (test_routing.py)
- Optimizer service and scenario tests (test_optimizer.py)
- Configuration tests (test_config.py)
- Tabular adapter tests (test_frames.py)
- Test configuration (conftest.py)
"""
