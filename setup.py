from setuptools import setup, find_packages

setup(name='fluidmix',
    version='0.1',
    description='Multicomponent fluid properties with Wilke and Davidson mixing rules',
    url='github.com/shwina/fluidmix',
    author='Ashwin Srinath',
    packages=find_packages(include=['fluidmix', 'fluidmix.*']),
    python_requires='>=3.8',
    install_requires=['numpy', 'numba', 'pyyaml', 'h5py', 'cantera'],
    extras_require={'test': ['pytest'], 'plot': ['matplotlib']},
    zip_safe=False)
