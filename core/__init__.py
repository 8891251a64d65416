"""
Core: Input-to-Flight-State Pipeline

No pygame in this package; everything here runs headless:

  input_device.py   Dual-axis joystick math + keyboard input source
  control_mapper.py Stick vectors / key presses -> FlightTargets
  integrator.py     FlightTargets + dt -> smoothed FlightState
  frame_clock.py    Frame delta time + rolling FPS
  session.py        FlightControlSession wiring all of the above

Data types live in flight_state.py.
"""
