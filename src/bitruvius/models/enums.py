"""Enumerations used throughout Bitruvius."""

from enum import StrEnum


class PartName(StrEnum):
    """Bones of the posable mannequin, named after the joint they pivot on."""

    WAIST = "waist"
    TORSO = "torso"
    COLLAR = "collar"
    HEAD = "head"
    R_SHOULDER = "r_shoulder"
    R_ELBOW = "r_elbow"
    R_WRIST = "r_wrist"
    L_SHOULDER = "l_shoulder"
    L_ELBOW = "l_elbow"
    L_WRIST = "l_wrist"
    R_THIGH = "r_thigh"
    R_SHIN = "r_shin"
    R_ANKLE = "r_ankle"
    L_THIGH = "l_thigh"
    L_SHIN = "l_shin"
    L_ANKLE = "l_ankle"


class WalkBone(StrEnum):
    """Bones of the walking figure. Values match the WalkPose keys."""

    WAIST = "waist"
    TORSO = "torso"
    COLLAR = "collar"
    NECK = "neck"
    R_SHOULDER = "r_shoulder"
    R_ELBOW = "r_elbow"
    R_HAND = "r_hand"
    L_SHOULDER = "l_shoulder"
    L_ELBOW = "l_elbow"
    L_HAND = "l_hand"
    L_HIP = "l_hip"
    L_KNEE = "l_knee"
    L_FOOT = "l_foot"
    R_HIP = "r_hip"
    R_KNEE = "r_knee"
    R_FOOT = "r_foot"
