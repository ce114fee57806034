import logging
from matplotlib import pyplot as plt
from sdfmarch.sdb import *
from sdfmarch.sdb import demoscenes

logging.basicConfig(level=logging.INFO)

surface = demoscenes.make_julia()
marcher = RayMarcher(surface, MarchConfig(max_iterations=500), 'numba')
viewport = Viewport((0., 0.5, 0.), pitch=-10)

if __name__ == '__main__':
    image = render(marcher, viewport, 320, 180)

    plt.imshow(image)
    plt.show()
