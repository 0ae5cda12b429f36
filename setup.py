from setuptools import setup, find_packages

setup(
    name='fanforge',
    version='0.1.0',
    author='fanforge contributors',
    description='An interactive electric fan built from primitive meshes, rendered with ModernGL and GLFW.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'examples']),
    include_package_data=True,
    package_data={'fanforge': ['glsl/*.glsl', 'glsl/*.vert', 'glsl/*.frag']},
    install_requires=[
        'numpy',
        'moderngl',
        'glfw',
    ],
    extras_require={
        'record': [
            'Pillow',
        ],
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics :: 3D Rendering',
    ],
    python_requires='>=3.8',
)
