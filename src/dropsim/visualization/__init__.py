from .plotting import chart_limits, plot_kinematics, plot_speed
