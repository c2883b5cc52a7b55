import sys

import numpy as np
import urdfkin


def show_bounce(model, steps=5):
    """
    A basic demonstration which will print the tip of every
    leaf joint as the actuated joints move between their limits.

    Parameters
    -----------
    model : urdfkin.KinematicModel
      Resolved model
    steps : int
      Number of configurations between lower and upper limits
    """
    forward = model.forward_kinematics_lambda()
    limits = model.limits.copy()
    # unbounded parameters swing through a half turn
    unbounded = ~np.isfinite(limits)
    limits[unbounded] = np.sign(limits[unbounded]) * np.pi / 2

    leaves = [name for name, joint in model.joints.items()
              if len(joint.children) == 0]
    for state in np.linspace(limits[:, 0], limits[:, 1], steps):
        tips = {name: forward[name](*state)[:3, 3].round(3)
                for name in leaves}
        print(tips)


if __name__ == '__main__':

    model = urdfkin.load(sys.argv[1], root_kind='fixed')
    print(model.report())
    show_bounce(model)
