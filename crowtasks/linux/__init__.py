"""
Linux packaging tasks, staging package trees and building them in docker
"""
from .tasks import (PackagingInit, ProcessResources, ProcessDockerSources,
                    ProcessSharedSources, ProcessDistributionSources, ProcessArtifacts)
from .docker import BuildImages, BuildPackages

TASKS = [PackagingInit, ProcessResources, ProcessDockerSources,
         ProcessSharedSources, ProcessDistributionSources, ProcessArtifacts,
         BuildImages, BuildPackages]
