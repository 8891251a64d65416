"""
Simulation: pygame front end for the flight control panel

  joystick_widget.py  Two draggable on-screen sticks
  drone_model.py      Drone model description + deferred loader
  graphics.py         3D viewport (grid, axes, drone)
  dashboard.py        Flight readouts, mode buttons, status bar
"""
