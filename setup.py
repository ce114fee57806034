from setuptools import setup, find_packages

setup(name="sdfmarch", version=0.1, description="Sphere tracing renderer for signed distance fields",
      author='Dane Austin', author_email='dane_austin@fastmail.com.au',
      packages=find_packages(exclude=['test', 'examples']),
      install_requires=['numpy', 'numba', 'scipy', 'pyyaml', 'matplotlib'], extras_require={'test': ['pytest']},
      entry_points={'console_scripts': ['sdfmarch-render=sdfmarch.sdb.cli:render_scene']}, python_requires='>=3.7')
